"""Theme package.

Hosts the accessible color ramp engine (``theme.color_ramps``). Rendering the
ramps into stylesheets is left to the consuming application.
"""
