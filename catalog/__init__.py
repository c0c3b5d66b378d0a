"""Space catalog API: spaces, their taxonomies and the users who submit them."""
