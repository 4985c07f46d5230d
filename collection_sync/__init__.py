"""
Collection Sync Service
=======================

Assigns Shopify products to catalog collections based on their titles.

Features:
- Keyword/shape/gemstone title classification
- Retrying collection writes against the Admin REST API
- Product webhooks with HMAC verification and a manual batch trigger

"""

__version__ = "1.0.0"
