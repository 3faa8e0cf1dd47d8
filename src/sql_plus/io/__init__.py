"""Database I/O: connections, statements and bulk loading."""
