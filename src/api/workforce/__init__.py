"""Workforce bounded context.

Owns the lifecycle of tenants (restaurants), employees and the identity
provider accounts (principals) linked to them.
"""
