"""Registry — the authoritative, queryable set of instruction shapes.

The registry provides:
- Lookup: instruction descriptors by name
- Account checks: positional signer/writable validation
- Argument codec: encode/decode the fixed-width argument payload
- Instruction data: discriminator-prefixed payloads and their inverse
"""
