"""Consent, record and audit services owned by the HealthChain context."""

from .health_chain import HealthChain, get_healthchain
