"""Billminder: reminders for bills, tax deadlines and business tasks."""

__version__ = "0.1.0"
