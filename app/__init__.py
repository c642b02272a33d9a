"""
Complaint desk: complaint intake and triage API.
"""
