"""Database infrastructure - shared async engine and declarative base."""
