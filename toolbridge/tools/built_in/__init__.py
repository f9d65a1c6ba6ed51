"""Built-in tools shipped with toolbridge

Modules in this package are scanned by tool discovery.
"""
