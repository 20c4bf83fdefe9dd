"""
Services Module - business logic called by the HTTP routers.
"""
