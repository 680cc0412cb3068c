"""Pydantic schemas: the wire contract for members, expenses, payments and settlements."""
