"""
The beanpath library: read and write values in nested object graphs by following
path expressions like ``person.friends[5].name``.
"""
VERSION = '1.0.0'
