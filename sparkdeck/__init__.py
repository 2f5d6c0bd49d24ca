"""
SparkDeck - a showcase of startup ideas.

Core components: the Data Store (sparkdeck.store), the View Renderer
(sparkdeck.render) and the Carousel Interaction Controller
(sparkdeck.carousel), composed by sparkdeck.showcase.Showcase.
"""

__version__ = "1.0.0"
