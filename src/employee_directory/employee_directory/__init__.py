"""Employee Directory package.

This package is organized by feature modules (users, auth, employees, uploads)
with a thin Flask controller layer over service/repository layers.
"""
