"""
Core Layer.

Pure date reconciliation logic and the pydantic models shared by the
infrastructure, service and trigger layers. No I/O happens here.
"""
