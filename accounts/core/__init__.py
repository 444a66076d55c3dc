"""
Cross-cutting helpers shared by every layer of the accounts service.

- configuration (env vars, store backend selection)
- logging setup
- deadlines propagated from callers down to the store calls
"""
