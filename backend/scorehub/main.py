from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from scorehub import get_accounts
from scorehub.errors import BadRequest, Unauthorized
from scorehub.schemas import LoginRequest, RegisterRequest, parse_body

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the scorehub game server!'})


@main.route('/register', methods=['POST'])
def register():
    data = parse_body(RegisterRequest, request.get_json(silent=True), BadRequest('Missing login or password'))
    player_id = get_accounts().register(data.login, data.password)
    return jsonify({'message': 'User registered', 'player_id': player_id}), 201


@main.route('/check-login', methods=['GET'])
def check_login():
    login = request.args.get('login')
    current_app.logger.debug(f"[check-login] login={login!r}")
    # plain-text body by contract
    return 'true' if get_accounts().is_login_available(login) else 'false'


@main.route('/login', methods=['POST'])
def login():
    data = parse_body(LoginRequest, request.get_json(silent=True), Unauthorized('Invalid credentials'))
    return jsonify(get_accounts().authenticate(data.login, data.password))


@main.route('/me', methods=['GET'])
@login_required
def me():
    payload = current_user.to_dict()
    payload['player_id'] = current_user.player_id
    return jsonify(payload)
