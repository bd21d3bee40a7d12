"""
Theurgy - Command implementations for the Sibyl CLI.

Each module corresponds to a top-level CLI command:
- keygen: Generate a mnemonic + address and save keys.json
- deploy: Upload and instantiate the score contract
- query:  Read the caller's score (and contract statistics)
- submit: Record a score on the contract
"""
