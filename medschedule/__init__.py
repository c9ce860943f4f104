"""MedSchedule backend - doctor/patient appointment scheduling API"""
