"""Service layer: session flow on top of the domain engine, audio and scheduling."""
