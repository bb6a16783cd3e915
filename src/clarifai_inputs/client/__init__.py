"""
Session, request and error types for talking to the Clarifai API.
"""
