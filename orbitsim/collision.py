"""Collision detection (GJK, EPA) and impulse-based collision response."""

from __future__ import annotations

import functools
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from orbitsim.components import Body, CircleBody
from orbitsim.events import CollisionEvent, Event
from orbitsim.scene import Scene
from orbitsim.vector import (
    Vec2,
    closest_point,
    cross,
    dot,
    norm,
    norm2,
    perpendicular,
    perpendicular_towards,
    rotate,
)

SupportFunction = Callable[[Vec2], Vec2]

EPS = 0.0001
_GJK_MAX_ITER = 50
_EPA_MAX_ITER = 100
_ORIGIN = Vec2(0.0, 0.0)


class MinkowskiPolygon:
    """Points of the Minkowski difference A - B, kept with the points of A and B."""

    def __init__(self) -> None:
        self._points_a: list[Vec2] = []
        self._points_b: list[Vec2] = []

    def push_back(self, a: Vec2, b: Vec2) -> None:
        self.insert(len(self), a, b)

    def insert(self, index: int, a: Vec2, b: Vec2) -> None:
        self._points_a.insert(index, a)
        self._points_b.insert(index, b)

    def erase(self, index: int) -> None:
        self._points_a.pop(index)
        self._points_b.pop(index)

    def difference(self, index: int) -> Vec2:
        return self.point_a(index) - self.point_b(index)

    def point_a(self, index: int) -> Vec2:
        return self._points_a[index]

    def point_b(self, index: int) -> Vec2:
        return self._points_b[index]

    def copy(self) -> MinkowskiPolygon:
        other = MinkowskiPolygon()
        other._points_a = list(self._points_a)
        other._points_b = list(self._points_b)
        return other

    def __len__(self) -> int:
        return len(self._points_a)


@dataclass
class ContactInfo:
    """Contact points on A and B, unit normal from A to B, and signed distance.

    A positive distance means a gap, a negative one an overlap.
    """

    c_a: Vec2
    c_b: Vec2
    normal: Vec2
    distance: float


def _local_to_world(body: Body, point: Vec2) -> Vec2:
    return body.position + rotate(point - body.center_of_mass, body.rotation)


def _points_support(points: Sequence[Vec2], direction: Vec2) -> Vec2:
    """Support function of a finite point set: the point furthest along direction."""
    return max(points, key=lambda point: dot(point, direction))


def _create_contact_info(
    simplex: MinkowskiPolygon, i: int, j: int, inside: bool
) -> ContactInfo:
    a_i, a_j = simplex.point_a(i), simplex.point_a(j)
    b_i, b_j = simplex.point_b(i), simplex.point_b(j)
    d_i, d_j = a_i - b_i, a_j - b_j
    # Barycentric coordinate of the projection of the origin on the edge.
    alpha = dot(d_j - d_i, -d_i) / norm2(d_j - d_i)
    if not inside:
        alpha = min(max(alpha, 0.0), 1.0)
    a = a_i * (1 - alpha) + a_j * alpha
    b = b_i * (1 - alpha) + b_j * alpha
    normal = -d_i * (1 - alpha) - d_j * alpha
    distance = norm(a - b) * (-1.0 if inside else 1.0)
    return ContactInfo(a, b, normal / norm(normal), distance)


def _update_simplex_line(simplex: MinkowskiPolygon) -> tuple[bool, Vec2]:
    a, b = simplex.difference(1), simplex.difference(0)
    return False, perpendicular_towards(b - a, -a)


def _update_simplex_triangle(
    simplex: MinkowskiPolygon, direction: Vec2
) -> tuple[bool, Vec2]:
    a, b, c = simplex.difference(2), simplex.difference(1), simplex.difference(0)
    ac, ab = c - a, b - a
    ac_perp = perpendicular_towards(ac, -ab)
    if dot(ac_perp, -a) > 0:
        simplex.erase(1)
        return False, ac_perp
    ab_perp = perpendicular_towards(ab, -ac)
    if dot(ab_perp, -a) > 0:
        simplex.erase(0)
        return False, ab_perp
    return True, direction


def _update_simplex(simplex: MinkowskiPolygon, direction: Vec2) -> tuple[bool, Vec2]:
    """Return whether the simplex holds the origin, and the next direction."""
    if len(simplex) == 2:
        return _update_simplex_line(simplex)
    if len(simplex) == 3:
        return _update_simplex_triangle(simplex, direction)
    raise ValueError(f"simplex must have 2 or 3 points, not {len(simplex)}")


def _update_simplex_distance(simplex: MinkowskiPolygon) -> Vec2:
    """Closest point to the origin; drops the vertex not on the closest feature."""
    closest0 = closest_point(simplex.difference(2), simplex.difference(0), _ORIGIN)
    closest1 = closest_point(simplex.difference(2), simplex.difference(1), _ORIGIN)
    if norm2(closest0) < norm2(closest1):
        simplex.erase(1)
        return closest0
    simplex.erase(0)
    return closest1


def collision_gjk(
    function_a: SupportFunction, function_b: SupportFunction
) -> tuple[bool, MinkowskiPolygon]:
    """Detect a collision; return it with the last simplex of the difference."""
    direction = Vec2(1.0, 0.0)
    support_a = function_a(direction)
    support_b = function_b(-direction)
    simplex = MinkowskiPolygon()
    simplex.push_back(support_a, support_b)
    direction = -(support_a - support_b)

    for _ in range(_GJK_MAX_ITER):
        support_a = function_a(direction)
        support_b = function_b(-direction)
        support_point = support_a - support_b
        simplex.push_back(support_a, support_b)
        if dot(support_point, direction) < 0:
            return False, simplex
        inside, direction = _update_simplex(simplex, direction)
        if inside:
            return True, simplex
    return False, simplex


def distance_gjk(
    function_a: SupportFunction,
    function_b: SupportFunction,
    simplex: MinkowskiPolygon,
) -> ContactInfo:
    """Gap between two non-colliding shapes, from the simplex left by collision_gjk."""
    if len(simplex) not in (2, 3):
        raise ValueError(f"simplex must have 2 or 3 points, not {len(simplex)}")
    simplex = simplex.copy()

    if norm(simplex.difference(0) - simplex.difference(1)) < EPS:
        a, b = simplex.point_a(0), simplex.point_b(0)
        return ContactInfo(a, b, (b - a) / norm(b - a), norm(b - a))

    if len(simplex) == 3:
        closest = _update_simplex_distance(simplex)
    else:
        closest = closest_point(simplex.difference(0), simplex.difference(1), _ORIGIN)
    direction = -closest
    support_point = simplex.difference(1)

    for t in range(_GJK_MAX_ITER):
        support_a = function_a(direction)
        support_b = function_b(-direction)
        old_support_point = support_point
        support_point = support_a - support_b
        no_progress = (
            abs(dot(old_support_point, direction) - dot(support_point, direction)) < EPS
        )
        if no_progress or t == _GJK_MAX_ITER - 1:
            return _create_contact_info(simplex, 0, 1, False)
        simplex.push_back(support_a, support_b)
        direction = -_update_simplex_distance(simplex)
    raise RuntimeError("distance search did not terminate")


def epa(
    function_a: SupportFunction,
    function_b: SupportFunction,
    polygon: MinkowskiPolygon,
) -> ContactInfo:
    """Penetration of two colliding shapes, from the triangle enclosing the origin."""
    if len(polygon) != 3:
        raise ValueError(f"polygon must have 3 points, not {len(polygon)}")
    polygon = polygon.copy()

    for t in range(_EPA_MAX_ITER):
        min_distance = math.inf
        min_normal = Vec2()
        min_index = -1
        count = len(polygon)
        for i in range(count):
            j = (i + 1) % count
            d_i, d_j = polygon.difference(i), polygon.difference(j)
            normal = perpendicular_towards(d_j - d_i, d_i)
            length = norm(normal)
            if length == 0:
                continue
            normal = normal / length
            distance = dot(normal, d_i)
            if distance < min_distance:
                min_distance = distance
                min_normal = normal
                min_index = i
        if min_index < 0:
            raise ValueError("degenerate polygon")

        support_a = function_a(min_normal)
        support_b = function_b(-min_normal)
        support_distance = dot(support_a - support_b, min_normal)
        if abs(support_distance - min_distance) <= EPS or t == _EPA_MAX_ITER - 1:
            return _create_contact_info(
                polygon, min_index, (min_index + 1) % len(polygon), True
            )
        polygon.insert((min_index + 1) % len(polygon), support_a, support_b)
    raise RuntimeError("expanding polytope did not terminate")


class CollisionSystem:
    """Detects and resolves collisions between bodies of a scene."""

    def __init__(self, scene: Scene) -> None:
        self._scene = scene
        self._collision_events: list[Event] = []

    def update(self) -> None:
        """Resolve collisions between every pair of circular bodies."""
        circles = self._scene.view(Body, CircleBody)
        for i, (id_a, body_a, circle_a) in enumerate(circles):
            for id_b, body_b, circle_b in circles[i + 1:]:
                self.collide_circles(id_a, id_b, circle_a, circle_b, body_a, body_b)

    def queue_events(self) -> list[Event]:
        """Return the collision events gathered so far and clear them."""
        events, self._collision_events = self._collision_events, []
        return events

    def collide_convexes(
        self,
        id_a: int,
        id_b: int,
        function_a: SupportFunction,
        function_b: SupportFunction,
        body_a: Body,
        body_b: Body,
    ) -> None:
        colliding, simplex = collision_gjk(function_a, function_b)
        if colliding:
            contact = epa(function_a, function_b, simplex)
            self.collision_response(id_a, id_b, body_a, body_b, contact)

    def collide_circles(
        self,
        id_a: int,
        id_b: int,
        circle_a: CircleBody,
        circle_b: CircleBody,
        body_a: Body,
        body_b: Body,
    ) -> None:
        diff_x = body_b.position - body_a.position
        dist = norm(diff_x)
        overlap = circle_a.radius + circle_b.radius - dist
        if overlap <= EPS or dist == 0:
            return
        m_a, m_b = body_a.mass, body_b.mass
        normal = diff_x / dist
        restitution = body_a.restitution * body_b.restitution
        added_vel = dot(body_a.velocity - body_b.velocity, normal) * normal / (m_a + m_b)
        body_a.velocity = body_a.velocity - added_vel * (m_b + restitution * m_b)
        body_b.velocity = body_b.velocity + added_vel * (m_a + restitution * m_a)

        # Separate the bodies, each moving in proportion to the other's mass.
        shift = diff_x * (overlap / (dist * (m_a + m_b)))
        body_a.position = body_a.position - shift * m_b
        body_b.position = body_b.position + shift * m_a

        self._collision_events.append(
            Event(id_a, True, CollisionEvent(norm(added_vel), id_b))
        )

    def collide_circle_and_convex(
        self,
        id_a: int,
        id_b: int,
        circle_a: CircleBody,
        function_b: SupportFunction,
        body_a: Body,
        body_b: Body,
    ) -> None:
        center_a = _local_to_world(body_a, Vec2(0.0, 0.0))
        function_a: SupportFunction = functools.partial(_points_support, (center_a,))

        colliding, simplex = collision_gjk(function_a, function_b)
        if not colliding:
            contact = distance_gjk(function_a, function_b, simplex)
            if circle_a.radius - contact.distance > EPS:
                contact.distance -= circle_a.radius
                contact.c_a = contact.c_a + contact.normal * circle_a.radius
                self.collision_response(id_a, id_b, body_a, body_b, contact)
        else:
            contact = epa(function_a, function_b, simplex)
            contact.c_a = contact.c_a + contact.normal * circle_a.radius
            contact.distance -= circle_a.radius
            self.collision_response(id_a, id_b, body_a, body_b, contact)

    def collision_response(
        self,
        id_a: int,
        id_b: int,
        body_a: Body,
        body_b: Body,
        contact: ContactInfo,
    ) -> None:
        """Apply the collision impulse with friction, then separate the bodies."""
        r_a = contact.c_a - body_a.position
        r_b = contact.c_b - body_b.position
        v_a, v_b = body_a.velocity, body_b.velocity
        m_a, m_b = body_a.mass, body_b.mass
        i_a, i_b = body_a.moment_of_inertia, body_b.moment_of_inertia
        w_a, w_b = body_a.angular_velocity, body_b.angular_velocity
        n = contact.normal
        r_a_n = cross(r_a, n)
        r_b_n = cross(r_b, n)
        restitution = body_a.restitution * body_b.restitution

        norm_j_elastic = (
            2
            * (dot(v_a - v_b, n) + cross(r_a * w_a - r_b * w_b, n))
            / (1 / m_a + 1 / m_b + r_a_n * r_a_n / i_a + r_b_n * r_b_n / i_b)
        )
        norm_j_inelastic = m_a * m_b * dot(v_a - v_b, n) / (m_a + m_b)
        j = n * (restitution * norm_j_elastic + (1 - restitution) * norm_j_inelastic)

        t = perpendicular(n, True)
        relative_velocity = dot(v_a - v_b, t) - w_a * norm(r_a) - w_b * norm(r_b)
        if abs(relative_velocity) >= EPS:
            sign = math.copysign(1.0, relative_velocity)
            j = j + t * (body_a.friction * body_b.friction * norm(j) * sign)

        body_a.velocity = body_a.velocity - j / m_a
        body_b.velocity = body_b.velocity + j / m_b
        body_a.angular_velocity -= cross(r_a, j) / i_a
        body_b.angular_velocity += cross(r_b, j) / i_b

        total_mass = m_a + m_b
        body_a.position = body_a.position + n * (contact.distance * m_b / total_mass)
        body_b.position = body_b.position - n * (contact.distance * m_a / total_mass)

        self._collision_events.append(Event(id_a, True, CollisionEvent(norm(j), id_b)))