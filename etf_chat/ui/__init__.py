"""NiceGUI interface - thin visualization layer for chat interactions.

Subscribes to the conversation store and redraws on every snapshot.
Contains no protocol logic; sends go through the chat controller.
"""
