"""Leave quota & absence ledger package.

Organized by feature modules (quota, leaves, alpha, ...) with service and
repository layers; persistence lives behind repository protocols.
"""
