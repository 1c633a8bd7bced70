"""Services — pure operations over environment snapshots and tap trees."""
