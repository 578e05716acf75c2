"""
Ntropy CLI - transaction enrichment from your terminal.

This CLI wraps the Ntropy API with commands for:
- Storing the API key locally
- Enriching single transactions and batches
- Managing account holders
- Fetching reports and metrics
- Listing labels
"""

__version__ = "1.0.0"
__app_name__ = "Ntropy"
