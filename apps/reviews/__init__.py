"""Reviews app package.

Ratings and comments left by users on listings. A review's lifetime is
bounded by its parent listing; it is deleted individually by its author
or together with the listing.
"""
