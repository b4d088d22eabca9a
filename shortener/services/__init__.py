"""
Services module for business logic separation.

This module contains the service layer that validates user input and
translates datastore outcomes into Results, keeping it separate from the
datastore and the console.
"""
