"""Listings app package.

This app encapsulates all functionality related to rental listings:
the listing model, the geocoding and media adapters, the ownership guard
and the listing service that orchestrates create, update and cascading
delete.
"""
