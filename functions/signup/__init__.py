"""
Registration backend package.

Provides a FastAPI application for the event sign-up form together with the
persistence collaborators it can be wired to (CSV file, SQL database,
Firestore, object storage or in-memory), selected through configuration.
"""
