"""Test suite for dimensify.

Test Structure:
- unit/api/http/: async HTTP client, error taxonomy and helpers
- unit/generation/: error normalizer, adapters and orchestrator
- unit/config/: config loading and environment credentials
- unit/utils/: logging setup

Backends are never contacted; every HTTP test runs against
``httpx.MockTransport`` and every poll delay is replaced by a recording fake.
"""
