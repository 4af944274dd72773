"""
Home Routes
"""

from flask import g

from portal.home import home_bp
from portal.utils import render_page


@home_bp.route('/')
def index():
    """Landing page with any pending notices"""
    return render_page('index.html', user=g.get('user'))
