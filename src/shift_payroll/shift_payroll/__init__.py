"""Shift payroll package.

Feature modules (members, locations, attendance, shifts, payroll) each keep a
model, a repository interface with in-memory and MySQL implementations, a
service holding the business rules and a thin Flask controller.
"""
