"""
Chat bounded context, domain layer.

This module contains all domain logic for the nutrition chat context:
- Chat conversations and their messages
- Product recommendations attached to assistant messages
- Product consumption logs
- Per-day query quota per client
"""
