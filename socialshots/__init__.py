"""SocialShots - resize, convert and generate social media images."""

__version__ = "0.1.0"
