"""Firestore integration (REST API + google-auth)."""

from collab_sync.infrastructure.firebase.client import (
    FirebaseCredentials,
    create_firestore_client,
    load_firebase_credentials,
)

__all__ = [
    "FirebaseCredentials",
    "create_firestore_client",
    "load_firebase_credentials",
]
