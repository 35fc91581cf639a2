from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/plans", methods=["GET"], endpoint="list_plans")
    def list_plans():
        plans = container.plan_service.list_plans()
        return jsonify([p.to_dict() for p in plans])

    @app.route("/api/plans/<int:plan_id>", methods=["GET"], endpoint="get_plan")
    def get_plan(plan_id: int):
        return jsonify(container.plan_service.get_plan(plan_id).to_dict())

    @app.route("/api/plans", methods=["POST"], endpoint="create_plan")
    def create_plan():
        data = request.get_json(silent=True) or {}
        plan = container.plan_service.create_plan(
            name=data.get("name"),
            duration_months=data.get("duration_months"),
            price=data.get("price"),
            description=data.get("description"),
        )
        return jsonify({"id": plan.plan_id, "name": plan.name, "message": "Plan created successfully"}), 201

    @app.route("/api/plans/<int:plan_id>", methods=["PUT"], endpoint="update_plan")
    def update_plan(plan_id: int):
        data = request.get_json(silent=True) or {}
        container.plan_service.update_plan(
            plan_id,
            name=data.get("name"),
            duration_months=data.get("duration_months"),
            price=data.get("price"),
            description=data.get("description"),
        )
        return jsonify({"message": "Plan updated successfully"})
