"""formflow_server: FastAPI HTTP surface for FormFlow.

Exposes the submission collector at ``POST /api/submit`` together with the
dashboard API, file uploads, embeddable form pages and a health probe.
"""
