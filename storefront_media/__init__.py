"""Storefront media storage service."""
