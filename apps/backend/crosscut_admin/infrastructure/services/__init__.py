"""
HTTP clients for the CrossCut services (BPO, PLM, DocGen).
"""

from .bpo_client import BPO_SERVICE, BpoClient
from .docgen_client import DOCGEN_SERVICE, DocGenClient
from .http_service import HttpServiceClient
from .plm_client import PLM_SERVICE, PlmClient

__all__ = [
    "BPO_SERVICE",
    "BpoClient",
    "DOCGEN_SERVICE",
    "DocGenClient",
    "HttpServiceClient",
    "PLM_SERVICE",
    "PlmClient",
]
