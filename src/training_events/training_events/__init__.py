"""Training event approvals package.

Organized by feature modules (approvals, attendance, companies, events, ...)
with a thin Flask controller layer over service/repository layers.
"""
