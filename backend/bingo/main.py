from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    registry = current_app.extensions['bingo']['registry']
    return jsonify({'message': 'Welcome to the bingo room server!', 'rooms': len(registry)})
