"""
Command line jobs for data import and account provisioning
"""
