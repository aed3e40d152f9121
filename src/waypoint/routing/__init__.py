"""Routing — ordered route table with placeholder templates.

Routes are matched in registration order; named routes can be turned
back into URLs with ``Router.generate``.
"""
