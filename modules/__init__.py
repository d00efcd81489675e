"""
Helper modules for ShopCheckout: output sinks, receipt layout, catalog.
"""
