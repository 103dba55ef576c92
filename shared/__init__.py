"""
Shared Kernel

Error taxonomy, value objects, payload validation and infrastructure
helpers shared by the users, listings and reviews apps.
"""
