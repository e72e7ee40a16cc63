"""Services subpackage - item collection, notifications, bulk entry, export and price lookup."""
