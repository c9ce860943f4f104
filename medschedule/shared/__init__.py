"""Cross-domain helpers: caller context, access guards, validators"""
