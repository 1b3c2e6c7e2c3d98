"""
Live streaming domain logic.

Includes:
- stream: Create, list and delete live streams held by the video provider.
"""
