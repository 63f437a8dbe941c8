"""Content collection queries for the site: listings, subposts, navigation, ToC."""
