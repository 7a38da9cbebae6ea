"""
Settings and logging shared by the dashboard core
"""
