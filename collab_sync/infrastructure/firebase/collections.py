"""Firestore collection names and document paths (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when a document is first written. Use these helpers so paths stay
consistent with the trigger document templates in the event router.
"""

COLLECTION_USERS = "users"
COLLECTION_PROJECTS = "projects"
SUBCOLLECTION_CONTRIBUTIONS = "contributions"
SUBCOLLECTION_NOTIFICATIONS = "notifications"
SUBCOLLECTION_CONTRIBUTORS = "contributors"


def user_path(uid: str) -> str:
    """users/{uid}"""
    return f"{COLLECTION_USERS}/{uid}"


def contribution_path(uid: str, project_id: str) -> str:
    """users/{uid}/contributions/{projectId}"""
    return f"{user_path(uid)}/{SUBCOLLECTION_CONTRIBUTIONS}/{project_id}"


def notifications_path(uid: str) -> str:
    """users/{uid}/notifications (collection; documents get generated IDs)"""
    return f"{user_path(uid)}/{SUBCOLLECTION_NOTIFICATIONS}"


def project_path(project_id: str) -> str:
    """projects/{projectId}"""
    return f"{COLLECTION_PROJECTS}/{project_id}"


def contributor_path(project_id: str, uid: str) -> str:
    """projects/{projectId}/contributors/{uid}"""
    return f"{project_path(project_id)}/{SUBCOLLECTION_CONTRIBUTORS}/{uid}"
