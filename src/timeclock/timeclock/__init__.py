"""Timeclock package.

Feature modules (attendance, users) with a thin Flask controller layer on top of
service/repository layers, the same way each feature is wired in ``container.py``.
"""
