"""The story machine: instruction format, reader, handlers and the player app."""