# ABOUTME: Core services for MyReads: cache-aside metadata resolution and the library overlay.
# ABOUTME: Composes the catalog client with the book cache and library entry stores.
