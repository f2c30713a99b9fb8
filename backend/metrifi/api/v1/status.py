from flask import current_app, jsonify
from . import v1_bp

@v1_bp.route('/status', methods=['GET'])
def plugin_status():
    return jsonify({
        "status": "active",
        "message": "MetriFi WP plugin is installed and active",
        "version": current_app.config["PLUGIN_VERSION"],
    })
