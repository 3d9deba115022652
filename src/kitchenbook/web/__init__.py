"""Kitchenbook HTTP API."""
