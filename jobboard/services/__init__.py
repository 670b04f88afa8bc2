"""
Services - read-only derivations and admin moderation transitions.
"""
