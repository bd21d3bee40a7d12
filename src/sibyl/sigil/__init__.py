"""
Sigil - Account key material (mnemonic + address).
"""
