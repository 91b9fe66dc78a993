"""
Domain core - slide entity, validators, value objects and ordering rules.
"""
