"""
===============================================================================
TARJETA CRC — crosscut_admin/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (feeds, catálogo, clientes HTTP) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para los clientes HTTP.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.services.* (puertos)
  - infrastructure.* (implementaciones)
  - application.* (facade y casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (el facade depende de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from .application import GetSystemMetricsUseCase, ResourceFacade
from .crosscutting.config import get_settings
from .domain.services import AuditFeed, HealthProbe, ProductCatalog
from .infrastructure.catalog import JsonFileProductCatalog, demo_product_catalog
from .infrastructure.feeds import InMemoryAuditFeed, JsonFileAuditFeed
from .infrastructure.services import BpoClient, DocGenClient, PlmClient

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """
    Determina si estamos en entorno de test.

    Regla:
      - app_env ∈ {"test", "testing", "ci"} => se favorecen in-memory adapters.
    """
    return get_settings().is_test()


# =============================================================================
# Clientes HTTP (singletons: comparten el pool de conexiones)
# =============================================================================


@lru_cache(maxsize=1)
def get_bpo_client() -> BpoClient:
    settings = get_settings()
    return BpoClient(settings.bpo_service_url, timeout_s=settings.http_timeout_seconds)


@lru_cache(maxsize=1)
def get_plm_client() -> PlmClient:
    settings = get_settings()
    return PlmClient(settings.plm_service_url, timeout_s=settings.http_timeout_seconds)


@lru_cache(maxsize=1)
def get_docgen_client() -> DocGenClient:
    settings = get_settings()
    return DocGenClient(
        settings.docgen_service_url, timeout_s=settings.http_timeout_seconds
    )


async def close_service_clients() -> None:
    """Cierra los clientes ya creados y limpia los caches (shutdown)."""
    for factory in (get_bpo_client, get_plm_client, get_docgen_client):
        if factory.cache_info().currsize:
            await factory().aclose()
        factory.cache_clear()
    # R: el catálogo puede ser el PlmClient recién cerrado.
    get_product_catalog.cache_clear()
    get_audit_feed.cache_clear()


# =============================================================================
# Fuentes de datos
# =============================================================================


@lru_cache(maxsize=1)
def get_audit_feed() -> AuditFeed:
    """
    Devuelve el feed del audit log de BPO.

    Regla:
      - test => InMemoryAuditFeed vacío (sin tocar disco)
      - otro => JsonFileAuditFeed sobre AUDIT_LOG_PATH
    """
    if _is_test_env():
        return InMemoryAuditFeed()
    return JsonFileAuditFeed(get_settings().audit_log_path)


@lru_cache(maxsize=1)
def get_product_catalog() -> ProductCatalog:
    """
    Devuelve el catálogo de productos.

    Regla:
      - test o PRODUCT_SOURCE=memory => catálogo demo en memoria
      - PRODUCT_SOURCE=file => archivo de datos de PLM
      - PRODUCT_SOURCE=plm => servicio PLM (GET /products)
    """
    settings = get_settings()
    if _is_test_env() or settings.product_source == "memory":
        return demo_product_catalog()
    if settings.product_source == "file":
        return JsonFileProductCatalog(settings.plm_data_path)
    return get_plm_client()


def get_health_probes() -> List[HealthProbe]:
    return [get_bpo_client(), get_plm_client(), get_docgen_client()]


# =============================================================================
# Application
# =============================================================================


def get_resource_facade() -> ResourceFacade:
    return ResourceFacade(
        audit_feed=get_audit_feed(),
        product_catalog=get_product_catalog(),
        trigger_gateway=get_bpo_client(),
        default_trigger_event=get_settings().default_trigger_event,
    )


def get_system_metrics_use_case() -> GetSystemMetricsUseCase:
    return GetSystemMetricsUseCase(
        facade=get_resource_facade(),
        health_probes=get_health_probes(),
    )
