"""Billing application for the hospital backend.

This package contains the models, services, views and route registrations
that turn a discharged admission into a persisted bill.
"""
