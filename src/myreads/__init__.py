# ABOUTME: MyReads - a personal reading library backed by a cached book catalog.
# ABOUTME: Package root; subpackages hold the catalog client, database, and services.
