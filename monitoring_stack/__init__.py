"""
Monitoring Stack - operations toolkit for the multi-cloud monitoring platform.

This package contains the modules that drive the platform's external tools
and the demo application used to exercise the monitoring stack:
- provisioning: Terraform apply driver per cloud provider and component
- alerting: Tenant registry, alert routing and mimirtool pushers
- api: FastAPI demo users service (users CRUD, synthetic metrics, health)
- db: SQLAlchemy persistence for the demo service
- services: Business logic and the Redis-backed users cache
- monitoring: Prometheus instrumentation
- config: Pydantic settings and configuration
- core: Exceptions, logging and external process execution
"""

__version__ = "0.1.0"
