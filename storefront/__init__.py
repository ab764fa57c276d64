"""Storefront client for the piercing shop backend."""
