"""Bingo room services: registry, boards, scoring, sessions, leaderboard.

Pure in-memory domain logic imported by HTTP routes and socket handlers.
Nothing here touches Flask; outbound messages go through a channel object
with send/publish/subscribe/unsubscribe.
"""
