"""Infrastructure adapters: Firestore REST client, repositories, blob storage."""
