"""
OzBargain Deal Notifier

A scheduled job that scrapes OzBargain deal blocks and posts
formatted summaries to a Discord webhook.
"""

__version__ = "0.1.0"
__author__ = "OzBargain Deal Notifier Team"
