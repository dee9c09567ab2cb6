# =============================================================================
# clients/__init__.py
# =============================================================================
# This package holds the adapter around the Twitter SDK (tweepy).
#
# It is the only place that knows Twitter exists as a network service.  It
# speaks core/ models on its public side and tweepy on its private side, and
# turns every SDK failure into a core.errors.PlatformError.
# =============================================================================
