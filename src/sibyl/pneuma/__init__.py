"""
Pneuma - On-chain interaction layer for Sibyl.

Provides the signing chain client, the local contract files, and the
bootstrap (upload + instantiate) and interaction (query + execute)
workflows.

Uses secret-sdk for signing, payload encryption and broadcasting.
"""
