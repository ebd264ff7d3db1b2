"""routes 패키지: Blueprint 중앙 등록"""


def register_blueprints(app, csrf=None):
    from routes.auth import auth_bp
    from routes.inquiries import inquiries_bp
    from routes.stats import stats_bp

    # JSON API 는 세션 쿠키 + JSON 본문으로만 호출되므로 CSRF 토큰 검사 제외
    if csrf is not None:
        for bp in (auth_bp, inquiries_bp, stats_bp):
            csrf.exempt(bp)

    app.register_blueprint(auth_bp)
    app.register_blueprint(inquiries_bp)
    app.register_blueprint(stats_bp)
