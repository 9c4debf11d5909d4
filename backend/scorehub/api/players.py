from flask import Blueprint, jsonify, request
from scorehub import get_accounts
from scorehub.errors import BadRequest
from scorehub.schemas import AchievementUnlockRequest, ScoreUpdateRequest, UserLookup, parse_body


players = Blueprint('players', __name__)


@players.route('/user-data', methods=['GET'])
def user_data():
    # Unauthenticated read: any caller may look up any player
    lookup = UserLookup(login=request.args.get('login'), player_id=request.args.get('player_id'))
    return jsonify(get_accounts().get_user_data(login=lookup.login, player_id=lookup.player_id))


@players.route('/leaderboard', methods=['GET'])
def leaderboard():
    return jsonify({'leaderboard': get_accounts().leaderboard()})


@players.route('/update-score', methods=['POST'])
def update_score():
    data = parse_body(ScoreUpdateRequest, request.get_json(silent=True), BadRequest('Missing login or score'))
    get_accounts().update_score(data.login, data.score)
    return jsonify({'message': 'Score updated'})


@players.route('/unlock-achievement', methods=['POST'])
def unlock_achievement():
    data = parse_body(
        AchievementUnlockRequest,
        request.get_json(silent=True),
        BadRequest('Missing login or achievement_id'),
    )
    get_accounts().unlock_achievement(data.login, data.achievement_id)
    return jsonify({'message': 'Achievement unlocked'})
