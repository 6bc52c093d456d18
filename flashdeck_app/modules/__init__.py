"""Feature modules (blueprints) of the Flashdeck app."""
