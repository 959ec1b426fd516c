"""Users app package.

Identity records, the credential store, the token service and the access
control guard. ``apps.users.models.CustomUser`` is the AUTH_USER_MODEL
throughout the project.
"""
