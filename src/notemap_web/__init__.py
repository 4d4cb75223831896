"""Flask front end over notemap.Engine (see web.py)."""
