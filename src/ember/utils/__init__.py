"""Ember utilities — entity table and HTML escaping.

Import from the submodules directly (``ember.utils.escape``,
``ember.utils.constants``).
"""
