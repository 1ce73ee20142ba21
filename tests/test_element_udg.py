# 文件: tests/test_element_udg.py
"""
UDG 六面体单元单元测试
"""

import numpy as np
import pytest
from scipy.optimize import brentq

from pyudg.core.element import NODE_LOCAL, hex8_gauss_derivatives, hex8_shape_functions
from pyudg.core.element_udg import (
    HOURGLASS_BASE,
    UDGHexElement,
    avg_cart_derivs,
    avg_def_grad,
    geometric_stiffness,
    hex_volume,
    hourglass_force,
    hourglass_stiffness,
    hourglass_vectors,
    internal_force_vector,
    material_stiffness,
)
from pyudg.core.exceptions import DegenerateDeformationError, InvertedElementError
from pyudg.core.materials import ArrudaBoyce, FiberDirection, MaterialPoint, MuscleMaterial
from pyudg.core.mesh import Configuration
from pyudg.core.tensor import rotation_matrix

UNIT_CUBE = (NODE_LOCAL + 1.0) / 2.0

# 一般形状的六面体 (非平行六面体)
DISTORTED = UNIT_CUBE + np.array([
    [0.00, 0.00, 0.00],
    [0.10, 0.05, 0.00],
    [0.20, 0.10, -0.05],
    [-0.05, 0.15, 0.00],
    [0.05, 0.00, 0.10],
    [0.15, -0.05, 0.20],
    [0.10, 0.10, 0.15],
    [0.00, 0.05, 0.05],
])


def deform(mesh, F):
    """对网格施加均匀变形 x = F X"""
    mesh.set_displacements(mesh.X @ F.T - mesh.X)


class TestShapeFunctions:
    """测试形函数与积分表"""

    def test_partition_of_unity(self):
        N, dN = hex8_shape_functions(0.3, -0.2, 0.7)
        assert np.isclose(N.sum(), 1.0)
        assert np.allclose(dN.sum(axis=1), 0.0)

    def test_nodal_interpolation(self):
        for a, (r, s, t) in enumerate(NODE_LOCAL):
            N, _ = hex8_shape_functions(r, s, t)
            assert np.isclose(N[a], 1.0)

    def test_gauss_table(self):
        table = hex8_gauss_derivatives(2)
        assert len(table) == 8
        assert np.isclose(sum(w for _, w in table), 8.0)


class TestKinematics:
    """测试平均梯度、体积与变形梯度"""

    def test_unit_cube(self):
        assert np.isclose(hex_volume(UNIT_CUBE), 1.0)
        assert np.allclose(avg_cart_derivs(UNIT_CUBE), NODE_LOCAL.T / 4.0)

    def test_affine_volume(self):
        A = np.array([[2.0, 0.3, 0.0], [0.0, 3.0, 0.5], [0.1, 0.0, 4.0]])
        x = UNIT_CUBE @ A.T
        assert np.isclose(hex_volume(x), np.linalg.det(A))

    def test_gradient_identities(self):
        """Σ_a g_a = 0，Σ_a g_a ⊗ x_a = I (任意形状)"""
        g = avg_cart_derivs(DISTORTED)
        assert np.allclose(g.sum(axis=1), 0.0)
        assert np.allclose(g @ DISTORTED, np.eye(3))

    def test_distorted_volume(self):
        """直接对 detJ 做高阶积分作为参照"""
        from pyudg.core.quadrature import Quadrature

        points, weights = Quadrature.get_points_3d(3)
        ref = 0.0
        for p, w in zip(points, weights):
            _, dN = hex8_shape_functions(*p)
            ref += np.linalg.det(dN @ DISTORTED) * w
        assert np.isclose(hex_volume(DISTORTED), ref)

    def test_homogeneous_deformation(self, general_F):
        """均匀变形时平均变形梯度精确"""
        G0 = avg_cart_derivs(DISTORTED)
        x = DISTORTED @ general_F.T + np.array([0.3, -1.0, 2.0])
        assert np.allclose(avg_def_grad(x, G0), general_F)

    def test_inverted_geometry(self):
        mirrored = UNIT_CUBE * np.array([1.0, 1.0, -1.0])
        assert hex_volume(mirrored) < 0.0
        with pytest.raises(InvertedElementError):
            avg_cart_derivs(mirrored)


class TestHourglassVectors:
    """测试 Flanagan-Belytschko 沙漏向量"""

    def test_orthogonality(self):
        """γ_k 与常数场和线性场正交"""
        g = avg_cart_derivs(DISTORTED)
        Gamma = hourglass_vectors(DISTORTED, g)
        assert Gamma.shape == (8, 4)
        assert np.allclose(Gamma.T @ np.ones(8), 0.0)
        assert np.allclose(Gamma.T @ DISTORTED, 0.0)

    def test_unit_cube(self):
        """规则立方体上 γ_k = h_k / 8"""
        g = avg_cart_derivs(UNIT_CUBE)
        assert np.allclose(hourglass_vectors(UNIT_CUBE, g), HOURGLASS_BASE / 8.0)


class TestElementMatrices:
    """测试单元矩阵各部分"""

    @pytest.fixture
    def state(self, general_F):
        x = DISTORTED @ general_F.T
        g = avg_cart_derivs(x)
        v = hex_volume(x)
        mat = ArrudaBoyce(mu=1.0, N=10.0, k=10.0)
        mp = MaterialPoint(F=general_F)
        return x, g, v, mat.stress(mp), mat.tangent(mp)

    def test_contributions_symmetric(self, state):
        x, g, v, sigma, c = state
        for K in (
            material_stiffness(g, c, v),
            geometric_stiffness(g, sigma, v),
            hourglass_stiffness(x, g, v, c, 1.0),
        ):
            assert K.shape == (24, 24)
            assert np.allclose(K, K.T)

    def test_force_equilibrium(self, state):
        """单元节点力合力为零"""
        x, g, v, sigma, c = state
        f = internal_force_vector(g, sigma, v).reshape(8, 3)
        assert np.allclose(f.sum(axis=0), 0.0)

    def test_hourglass_off(self, state):
        x, g, v, sigma, c = state
        assert np.allclose(hourglass_stiffness(x, g, v, c, 0.0), 0.0)

    def test_hourglass_force_ignores_linear_fields(self, state):
        """线性位移场不产生沙漏力"""
        x, g, v, sigma, c = state
        X = x - (x @ np.array([[0.1, 0.2, 0.0], [0.0, -0.1, 0.3], [0.05, 0.0, 0.1]]).T + 0.5)
        assert np.allclose(hourglass_force(x, X, g, v, c), 0.0)


class TestUDGHexElement:
    """测试 UDG 单元"""

    def test_element_attributes(self, unit_cube, rubber):
        mesh, ids = unit_cube
        elem = UDGHexElement(7, ids, rubber)
        assert elem.id == 7
        assert elem.node_ids == tuple(ids)
        assert elem.material is rubber
        expected = np.concatenate([[3 * (n - 1), 3 * (n - 1) + 1, 3 * (n - 1) + 2] for n in ids])
        assert np.all(elem.get_dof_indices(mesh) == expected)

        with pytest.raises(ValueError):
            UDGHexElement(8, ids[:7], rubber)

    def test_rest_state(self, unit_cube, rubber):
        mesh, ids = unit_cube
        res = UDGHexElement(1, ids, rubber).evaluate(mesh)
        assert np.allclose(res.force, 0.0)
        assert np.allclose(res.stress, 0.0)
        assert np.isclose(res.volume, 1.0)
        assert np.allclose(res.stiffness, res.stiffness.T)

    def test_rigid_body_motion(self, unit_cube, rubber):
        """刚体平移加旋转: 内力 (含沙漏力) 为零"""
        mesh, ids = unit_cube
        Q = rotation_matrix([1.0, -0.5, 0.3], 0.6)
        mesh.set_displacements(mesh.X @ Q.T + np.array([1.0, 2.0, -3.0]) - mesh.X)

        res = UDGHexElement(1, ids, rubber).evaluate(mesh)
        assert np.allclose(res.stress, 0.0, atol=1e-9)
        assert np.allclose(res.force, 0.0, atol=1e-9)

    def test_stiffness_symmetric_deformed(self, unit_cube, rubber, general_F):
        mesh, ids = unit_cube
        deform(mesh, general_F)
        K = UDGHexElement(1, ids, rubber).stiffness(mesh)
        assert np.allclose(K, K.T, rtol=1e-10, atol=1e-8)

    def test_hourglass_mode_energy(self, unit_cube):
        """
        沙漏位移模式: 单点积分的材料刚度不感知，沙漏刚度给出正能量
        """
        mesh, ids = unit_cube
        mat = ArrudaBoyce(mu=1.0, N=10.0, k=10.0)
        elem = UDGHexElement(1, ids, mat)

        for k in range(4):
            u = np.zeros((8, 3))
            u[:, 0] = 0.01 * HOURGLASS_BASE[:, k]
            u = u.reshape(24)

            K = elem.stiffness(mesh, hourglass=1.0)
            K_free = elem.stiffness(mesh, hourglass=0.0)

            assert np.isclose(0.5 * u @ K_free @ u, 0.0, atol=1e-14), "未稳定时沙漏模式应为零能量"
            assert 0.5 * u @ K @ u > 0.0, "沙漏稳定化后能量应为正"

    def test_hourglass_smaller_than_material(self, unit_cube, rubber):
        mesh, ids = unit_cube
        x = mesh.positions(ids)
        g = avg_cart_derivs(x)
        c = rubber.tangent(MaterialPoint())
        K_hg = hourglass_stiffness(x, g, 1.0, c)
        K_mat = material_stiffness(g, c, 1.0)
        assert 0.0 < np.linalg.norm(K_hg) < np.linalg.norm(K_mat)

    def test_homogeneous_stress(self, unit_cube, general_F):
        """均匀变形时单元应力等于材料点应力"""
        mesh, ids = unit_cube
        mat = ArrudaBoyce(mu=1.0, N=10.0, k=10.0)
        deform(mesh, general_F)

        elem = UDGHexElement(1, ids, mat)
        expected = mat.stress(MaterialPoint(F=general_F))
        assert np.allclose(elem.element_stress(mesh), expected)

        res = elem.evaluate(mesh)
        assert np.allclose(res.stress, expected)
        assert np.allclose(res.material_point.F, general_F)
        assert np.allclose(res.material_point.r0, [0.5, 0.5, 0.5])

    def test_evaluate_does_not_mutate(self, unit_cube, rubber, general_F):
        mesh, ids = unit_cube
        deform(mesh, general_F)
        elem = UDGHexElement(1, ids, rubber)
        elem.evaluate(mesh)
        assert np.allclose(elem.point.F, np.eye(3))

    def test_update_and_commit(self, unit_cube, rubber, general_F):
        mesh, ids = unit_cube
        deform(mesh, general_F)
        elem = UDGHexElement(1, ids, rubber)

        s = elem.update_stress(mesh)
        assert np.allclose(elem.point.stress, s)

        elem.commit(mesh)
        assert np.allclose(elem.point.F_prev, general_F)

    def test_configurations(self, unit_cube, rubber, general_F):
        mesh, ids = unit_cube
        deform(mesh, general_F)
        elem = UDGHexElement(1, ids, rubber)

        ref = elem.evaluate(mesh, configuration=Configuration.REFERENCE)
        assert np.allclose(ref.force, 0.0)

        prev = elem.evaluate(mesh, configuration='previous')
        assert np.allclose(prev.force, 0.0)

        mesh.commit()
        cur = elem.evaluate(mesh)
        prev = elem.evaluate(mesh, configuration=Configuration.PREVIOUS)
        assert np.allclose(prev.force, cur.force)

    def test_inverted_current_configuration(self, unit_cube, rubber):
        mesh, ids = unit_cube
        u = np.zeros((8, 3))
        u[4:, 2] = -2.0  # 顶面压到底面以下
        mesh.set_displacements(u)

        with pytest.raises(InvertedElementError) as info:
            UDGHexElement(5, ids, rubber).evaluate(mesh)
        assert info.value.element_id == 5

    def test_material_failure_propagates(self, unit_cube):
        mesh, ids = unit_cube
        mat = MuscleMaterial(
            g1=1.0, g2=1.0, g3=0.0, p1=0.05, p2=6.6, Lofl=1.0, smax=1.0,
            lam_max=1.4, fiber=FiberDirection(field=lambda r0: np.zeros(3))
        )
        with pytest.raises(DegenerateDeformationError):
            UDGHexElement(1, ids, mat).evaluate(mesh)


class TestUniaxialScenario:
    """
    单位立方体近不可压单轴拉伸

    Arruda-Boyce (mu = 1, N = 10)，F = diag(1.2, λ, λ)，λ 使横向应力为零。
    不可压极限下 σ_xx = 2 W1 (1.2² - 1/1.2) = 0.694893877，λ = 1/√1.2 ≈ 0.913。
    """

    REFERENCE = 0.694893877

    def test_axial_stress(self, unit_cube, rubber):
        mesh, ids = unit_cube
        elem = UDGHexElement(1, ids, rubber)

        def transverse(lam):
            deform(mesh, np.diag([1.2, lam, lam]))
            return elem.element_stress(mesh)[1, 1]

        lam = brentq(transverse, 0.85, 0.98, xtol=1e-14)
        assert np.isclose(lam, 1.0 / np.sqrt(1.2), atol=2e-3)

        deform(mesh, np.diag([1.2, lam, lam]))
        res = elem.evaluate(mesh)
        s = res.stress

        assert np.isclose(s[0, 0], self.REFERENCE, rtol=2e-3)
        assert np.allclose([s[1, 1], s[2, 2]], 0.0, atol=1e-8)
        assert np.allclose([s[0, 1], s[0, 2], s[1, 2]], 0.0, atol=1e-12)

        # x = 1.2 面上的节点力合力 = σ_xx × 当前面积
        f = res.force.reshape(8, 3)
        right = NODE_LOCAL[:, 0] > 0
        assert np.isclose(f[right, 0].sum(), s[0, 0] * lam * lam)
        assert np.allclose(f[right, 1:].sum(axis=0), 0.0, atol=1e-10)
