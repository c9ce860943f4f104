"""Domain modules - one package per business area (router, service, repository, schemas)"""
