"""
Wire models for input resources and the builders for their endpoints.
"""
