"""Business logic services.

Every service function takes the store handle as its first argument.
"""
