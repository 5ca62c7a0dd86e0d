"""
Vitals - dependency health-check aggregation service.

Layer Structure:
- Domain: probe entities, probe registry and aggregation engine
- Application: use cases and DTOs
- Infrastructure: PostgreSQL and Redis clients and their probes
- Presentation: HTTP controllers and the health response writer
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""

__version__ = "1.0.0"
