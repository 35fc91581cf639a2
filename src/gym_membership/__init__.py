"""Gym Membership package.

Feature modules (members, plans, payments, attendance) each expose a thin Flask
controller over service and repository layers.
"""
