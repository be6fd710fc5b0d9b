"""
Service Request Intake API
"""
