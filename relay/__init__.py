"""Question relay: realtime answers, edits and chat with optimistic delivery."""
