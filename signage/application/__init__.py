"""
Application layer - ports for external collaborators and the slide service
contract handed to an API layer.
"""
