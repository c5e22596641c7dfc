"""Provision task engine: sequencing, submission and polling."""
