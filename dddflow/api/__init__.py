"""
dddflow API - FastAPI REST API over the validation engine.

Endpoints:
    GET    /api/health                                                 - Health check
    POST   /api/validation/flow                                        - Validate a flow document
    POST   /api/validation/domain/{domain_id}                          - Validate a domain document
    POST   /api/validation/system                                      - Validate event wiring
    GET    /api/validation/gate?flow_id=&domain_id=                    - Implement gate from cache
    GET    /api/validation/flows/{domain_id}/{flow_id}/nodes/{node_id}/issues
    DELETE /api/validation                                             - Reset cached results
"""

from .server import create_app

__all__ = ["create_app"]
