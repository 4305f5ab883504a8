"""Punchly core package.

Feature modules (employees, absences, attendance, reports, ...) each hold a
model, a repository interface, a service and a thin Flask controller.
Services return ``Result`` values and depend only on repository interfaces.
"""
