"""Childcare System package.

Organized by feature modules (children, roster, events, comments, ...)
with a thin Flask controller layer over service/repository layers that talk
to a remote document store.
"""
