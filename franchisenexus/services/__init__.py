"""
Services package for infrastructure-facing helpers.
"""
from franchisenexus.services.token_service import TokenService, get_token_service

__all__ = ['TokenService', 'get_token_service']
