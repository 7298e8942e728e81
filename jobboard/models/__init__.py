"""Job board models: JSON encoding, HTML sanitising and database row records."""