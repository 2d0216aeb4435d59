from flask import jsonify
from siteedit.services.interpreter import get_interpreter
from . import v1_bp

@v1_bp.route('/health', methods=['GET'])
def health_check():
    interpreter = get_interpreter()
    return jsonify({
        "status": "ok",
        "service": "siteedit",
        "interpreter": "available" if getattr(interpreter, "available", True) else "unconfigured",
    })
