"""
Async client SDK for the socialnet HTTP API.

``SocialClient`` talks to the server, ``FeedAssembler`` accumulates
cursor-paginated pages, and the optimistic toggles in
``socialnet.client.optimistic`` update a ``QueryCache`` before the
server confirms a change.
"""
