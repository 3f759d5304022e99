#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math


class Vec3:
    """Mutable 3-component vector."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __eq__(self, other):
        if isinstance(other, Vec3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    __hash__ = None

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def set(self, x, y, z) -> 'Vec3':
        """Overwrite all components in place."""
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def copy(self) -> 'Vec3':
        return Vec3(self.x, self.y, self.z)

    def to_tuple(self):
        return (self.x, self.y, self.z)

    @classmethod
    def from_iterable(cls, values) -> 'Vec3':
        x, y, z = values
        return cls(x, y, z)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> 'Vec3':
        m = self.magnitude()
        if m == 0:
            return Vec3(0, 0, 0)
        return self / m

    def distance_to(self, other) -> float:
        return (self - other).magnitude()


class Quaternion:
    """Unit quaternion for orientations, stored as (x, y, z, w)."""
    __slots__ = ('x', 'y', 'z', 'w')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def __repr__(self):
        return f"Quaternion({self.x:.3f}, {self.y:.3f}, {self.z:.3f}, {self.w:.3f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def set(self, x, y, z, w) -> 'Quaternion':
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)
        return self

    def copy(self) -> 'Quaternion':
        return Quaternion(self.x, self.y, self.z, self.w)

    def to_tuple(self):
        return (self.x, self.y, self.z, self.w)

    def conjugate(self) -> 'Quaternion':
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def normalize(self) -> 'Quaternion':
        n = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)
        if n == 0:
            return self.set(0.0, 0.0, 0.0, 1.0)
        return self.set(self.x / n, self.y / n, self.z / n, self.w / n)

    def multiply(self, other: 'Quaternion') -> 'Quaternion':
        """Return self * other (apply other first, then self)."""
        ax, ay, az, aw = self.x, self.y, self.z, self.w
        bx, by, bz, bw = other.x, other.y, other.z, other.w
        return Quaternion(
            ax * bw + aw * bx + ay * bz - az * by,
            ay * bw + aw * by + az * bx - ax * bz,
            az * bw + aw * bz + ax * by - ay * bx,
            aw * bw - ax * bx - ay * by - az * bz,
        )

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate a vector by this quaternion."""
        qv = Vec3(self.x, self.y, self.z)
        t = qv.cross(v) * 2.0
        return v + t * self.w + qv.cross(t)

    def set_from_euler(self, x: float, y: float, z: float) -> 'Quaternion':
        """Set from intrinsic XYZ Euler angles (radians)."""
        c1, s1 = math.cos(x / 2), math.sin(x / 2)
        c2, s2 = math.cos(y / 2), math.sin(y / 2)
        c3, s3 = math.cos(z / 2), math.sin(z / 2)
        return self.set(
            s1 * c2 * c3 + c1 * s2 * s3,
            c1 * s2 * c3 - s1 * c2 * s3,
            c1 * c2 * s3 + s1 * s2 * c3,
            c1 * c2 * c3 - s1 * s2 * s3,
        )

    def set_from_axes(self, xa: Vec3, ya: Vec3, za: Vec3) -> 'Quaternion':
        """Set from the columns of an orthonormal rotation matrix."""
        m11, m12, m13 = xa.x, ya.x, za.x
        m21, m22, m23 = xa.y, ya.y, za.y
        m31, m32, m33 = xa.z, ya.z, za.z
        trace = m11 + m22 + m33

        if trace > 0:
            s = 0.5 / math.sqrt(trace + 1.0)
            return self.set((m32 - m23) * s, (m13 - m31) * s,
                            (m21 - m12) * s, 0.25 / s)
        if m11 > m22 and m11 > m33:
            s = 2.0 * math.sqrt(1.0 + m11 - m22 - m33)
            return self.set(0.25 * s, (m12 + m21) / s,
                            (m13 + m31) / s, (m32 - m23) / s)
        if m22 > m33:
            s = 2.0 * math.sqrt(1.0 + m22 - m11 - m33)
            return self.set((m12 + m21) / s, 0.25 * s,
                            (m23 + m32) / s, (m13 - m31) / s)
        s = 2.0 * math.sqrt(1.0 + m33 - m11 - m22)
        return self.set((m13 + m31) / s, (m23 + m32) / s,
                        0.25 * s, (m21 - m12) / s)

    def set_from_look_at(self, eye: Vec3, target: Vec3, up: Vec3) -> 'Quaternion':
        """
        Orientation for an object at `eye` whose local -Z axis points at
        `target`, keeping local +Y as close to `up` as possible.
        """
        za = eye - target
        if za.magnitude() == 0:
            za = Vec3(0, 0, 1)
        za = za.normalize()

        xa = up.cross(za)
        if xa.magnitude() == 0:
            # up is parallel to the view direction; nudge to pick an axis
            if abs(up.z) == 1:
                za = Vec3(za.x + 0.0001, za.y, za.z).normalize()
            else:
                za = Vec3(za.x, za.y, za.z + 0.0001).normalize()
            xa = up.cross(za)
        xa = xa.normalize()
        ya = za.cross(xa)
        return self.set_from_axes(xa, ya, za)


class Mat4:
    """4x4 Matrix for transforms, [row][col] storage."""
    __slots__ = ('m',)

    def __init__(self, data=None):
        if data:
            self.m = data
        else:
            self.m = [[0.0] * 4 for _ in range(4)]

    @classmethod
    def identity(cls) -> 'Mat4':
        res = cls()
        for i in range(4):
            res.m[i][i] = 1.0
        return res

    @classmethod
    def translation(cls, x, y, z) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][3] = x
        mat.m[1][3] = y
        mat.m[2][3] = z
        return mat

    @classmethod
    def scale(cls, sx, sy, sz) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][0] = sx
        mat.m[1][1] = sy
        mat.m[2][2] = sz
        return mat

    @classmethod
    def rotation_x(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[1][1] = c
        mat.m[1][2] = -s
        mat.m[2][1] = s
        mat.m[2][2] = c
        return mat

    @classmethod
    def rotation_y(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[0][0] = c
        mat.m[0][2] = s
        mat.m[2][0] = -s
        mat.m[2][2] = c
        return mat

    @classmethod
    def rotation_z(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[0][0] = c
        mat.m[0][1] = -s
        mat.m[1][0] = s
        mat.m[1][1] = c
        return mat

    @classmethod
    def compose(cls, position: Vec3, rotation: Vec3, scale: Vec3) -> 'Mat4':
        """Translation * Rx * Ry * Rz * Scale (XYZ Euler order)."""
        return (cls.translation(position.x, position.y, position.z)
                @ cls.rotation_x(rotation.x)
                @ cls.rotation_y(rotation.y)
                @ cls.rotation_z(rotation.z)
                @ cls.scale(scale.x, scale.y, scale.z))

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            res = Mat4()
            for r in range(4):
                for c in range(4):
                    val = 0.0
                    for k in range(4):
                        val += self.m[r][k] * other.m[k][c]
                    res.m[r][c] = val
            return res
        return NotImplemented

    def mul_vec3(self, v) -> Vec3:
        """Multiply with a point as if w=1, return Vec3 (ignoring w result)."""
        x, y, z = v[0], v[1], v[2]
        m = self.m
        return Vec3(
            m[0][0] * x + m[0][1] * y + m[0][2] * z + m[0][3],
            m[1][0] * x + m[1][1] * y + m[1][2] * z + m[1][3],
            m[2][0] * x + m[2][1] * y + m[2][2] * z + m[2][3],
        )
