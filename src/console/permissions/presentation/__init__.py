"""Permissions presentation layer.

HTTP routes and the dialog view-models behind the administration views.
"""
