"""
HTTP routers for roster, plan and spell endpoints
"""
