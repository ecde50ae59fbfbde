"""Core constants: literal values written into denormalized documents.

Notification copy and URLs are read by client applications; keep them stable.
"""

NOTIFICATION_CONTRIBUTION_REQUEST_TITLE = "Contribution Request."
NOTIFICATION_CONTRIBUTION_REQUEST_URL = "users/requests"
NOTIFICATION_CONTRIBUTION_DELETED_TITLE = "Contribution Deleted."

# Auth types (CloudEvent "authtype" attribute) that carry an end-user identity
USER_AUTH_TYPES = frozenset({"app_user"})
