"""Users app package.

Identity store and authentication gate: the custom user model, signup
and credential verification, and the per-request context that carries
the resolved identity into listing and review services. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
