"""Python client for the station API: HTTP client, stores, router and views."""
