"""
Bank plugins.

Each bank class is tagged with BANK_TAG; the host discovers them by scanning
this package, so adding a bank means adding a module here.
"""
