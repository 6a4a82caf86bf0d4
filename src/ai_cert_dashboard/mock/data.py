"""Base figures served by the mock backend.

Counts here are the organisation-level values; generators scale them per
department with :data:`DEPARTMENT_MULTIPLIERS`.
"""

DEFAULT_DEPT_CODE = "0"

DEPARTMENT_MULTIPLIERS: dict[str, float] = {
    DEFAULT_DEPT_CODE: 1,
    "dept-ict-core-ops": 0.9,
    "dept-ict-core-dev": 1.1,
    "dept-ict-core-solution": 0.95,
}

DEPARTMENT_NAMES: dict[str, str] = {
    DEFAULT_DEPT_CODE: "云核心网产品线",
    "dept-ict-core-ops": "云核心网运营部",
    "dept-ict-core-dev": "云核心网研发部",
    "dept-ict-core-solution": "云核心网解决方案部",
}

# Share of the all-staff population per person type code
PERSON_TYPE_SHARES: dict[str, float] = {
    "0": 1.0,
    "1": 0.3,
    "2": 0.2,
    "3": 0.15,
}

# ---------------------------------------------------------------------------
# Maturity -> job category statistics
# ---------------------------------------------------------------------------

EXPERT_CERT_MATURITY = (
    {"maturity_level": "L2", "baseline_count": 80, "certified_count": 58},
    {"maturity_level": "L3", "baseline_count": 53, "certified_count": 37},
)

EXPERT_CERT_CATEGORIES = (
    {"job_category": "软件类", "baseline_count": 45, "certified_count": 32},
    {"job_category": "系统类", "baseline_count": 35, "certified_count": 25},
    {"job_category": "研究类", "baseline_count": 28, "certified_count": 20},
    {"job_category": "管理类", "baseline_count": 25, "certified_count": 18},
)

EXPERT_QUALIFIED_MATURITY = (
    {"maturity_level": "L2", "baseline_count": 80, "qualified_count": 63, "qualified_by_requirement_count": 54},
    {"maturity_level": "L3", "baseline_count": 53, "qualified_count": 42, "qualified_by_requirement_count": 36},
)

EXPERT_QUALIFIED_CATEGORIES = (
    {"job_category": "软件类", "baseline_count": 45, "qualified_count": 35, "qualified_by_requirement_count": 30},
    {"job_category": "系统类", "baseline_count": 35, "qualified_count": 28, "qualified_by_requirement_count": 24},
    {"job_category": "研究类", "baseline_count": 28, "qualified_count": 22, "qualified_by_requirement_count": 19},
    {"job_category": "管理类", "baseline_count": 25, "qualified_count": 20, "qualified_by_requirement_count": 17},
)

CADRE_CERT_MATURITY = (
    {
        "maturity_level": "L1",
        "baseline_count": 120,
        "certified_count": 66,
        "subject2_pass_count": 48,
        "cert_standard_count": 60,
    },
    {
        "maturity_level": "L2",
        "baseline_count": 90,
        "certified_count": 61,
        "subject2_pass_count": 45,
        "cert_standard_count": 55,
    },
    {
        "maturity_level": "L3",
        "baseline_count": 60,
        "certified_count": 44,
        "subject2_pass_count": 33,
        "cert_standard_count": 40,
    },
)

CADRE_CERT_CATEGORIES = (
    {"job_category": "软件类", "baseline_count": 40, "certified_count": 30, "subject2_pass_count": 22, "cert_standard_count": 27},
    {"job_category": "系统类", "baseline_count": 30, "certified_count": 19, "subject2_pass_count": 14, "cert_standard_count": 17},
    {"job_category": "研究类", "baseline_count": 25, "certified_count": 17, "subject2_pass_count": 12, "cert_standard_count": 15},
    {"job_category": "管理类", "baseline_count": 20, "certified_count": 11, "subject2_pass_count": 8, "cert_standard_count": 10},
)

CADRE_QUALIFIED_MATURITY = (
    {"maturity_level": "L1", "baseline_count": 120, "qualified_count": 78, "qualified_by_requirement_count": 60},
    {"maturity_level": "L2", "baseline_count": 90, "qualified_count": 64, "qualified_by_requirement_count": 52},
    {"maturity_level": "L3", "baseline_count": 60, "qualified_count": 45, "qualified_by_requirement_count": 38},
)

CADRE_QUALIFIED_CATEGORIES = (
    {"job_category": "软件类", "baseline_count": 40, "qualified_count": 31, "qualified_by_requirement_count": 26},
    {"job_category": "系统类", "baseline_count": 30, "qualified_count": 21, "qualified_by_requirement_count": 17},
    {"job_category": "研究类", "baseline_count": 25, "qualified_count": 18, "qualified_by_requirement_count": 14},
    {"job_category": "管理类", "baseline_count": 20, "qualified_count": 13, "qualified_by_requirement_count": 10},
)

# ---------------------------------------------------------------------------
# Department and competence category statistics
# ---------------------------------------------------------------------------

DEPARTMENT_STATISTICS = (
    {"dept_code": "dept-ict-core-ops", "total_count": 320, "certified_count": 208, "qualified_count": 224},
    {"dept_code": "dept-ict-core-dev", "total_count": 280, "certified_count": 190, "qualified_count": 201},
    {"dept_code": "dept-ict-core-solution", "total_count": 240, "certified_count": 168, "qualified_count": 170},
)

COMPETENCE_CATEGORY_STATISTICS = (
    {"competence_category": "软件类", "total_count": 300, "certified_count": 210, "qualified_count": 225},
    {"competence_category": "系统类", "total_count": 210, "certified_count": 140, "qualified_count": 150},
    {"competence_category": "研究类", "total_count": 150, "certified_count": 105, "qualified_count": 110},
    {"competence_category": "测试类", "total_count": 100, "certified_count": 62, "qualified_count": 66},
    {"competence_category": "管理类", "total_count": 80, "certified_count": 49, "qualified_count": 44},
)

# ---------------------------------------------------------------------------
# Department tree
# ---------------------------------------------------------------------------

DEPARTMENT_TREE = (
    {
        "dept_code": "dept-ict-core-ops",
        "dept_name": "云核心网运营部",
        "dept_level": "3",
        "children": (
            {"dept_code": "dept-ict-core-ops-apac", "dept_name": "亚太运营支撑处", "dept_level": "4"},
            {"dept_code": "dept-ict-core-ops-emea", "dept_name": "欧洲中东非运营支撑处", "dept_level": "4"},
        ),
    },
    {
        "dept_code": "dept-ict-core-dev",
        "dept_name": "云核心网研发部",
        "dept_level": "3",
        "children": (
            {"dept_code": "dept-ict-core-dev-cloud", "dept_name": "网络云平台研发室", "dept_level": "4"},
            {"dept_code": "dept-ict-core-dev-ai", "dept_name": "AI 网络创新室", "dept_level": "4"},
        ),
    },
    {
        "dept_code": "dept-ict-core-solution",
        "dept_name": "云核心网解决方案部",
        "dept_level": "3",
        "children": (
            {"dept_code": "dept-ict-core-solution-5g", "dept_name": "5G 解决方案办", "dept_level": "4"},
            {"dept_code": "dept-ict-core-solution-cloud", "dept_name": "云化核心网方案办", "dept_level": "4"},
        ),
    },
)

# ---------------------------------------------------------------------------
# Entry-level managers
# ---------------------------------------------------------------------------

PL_TM_SUMMARY = {
    "dept_code": "030681",
    "dept_name": "云核心网研发管理部",
    "pl_tm": {"total_count": 150, "qualified_count": 120, "qualified_ratio": 0.8, "cert_count": 100, "cert_ratio": 0.6667},
    "pm": {"total_count": 80, "qualified_count": 60, "qualified_ratio": 0.75, "cert_count": 50, "cert_ratio": 0.625},
}

PL_TM_DEPARTMENTS = (
    {
        "dept_code": "030681001",
        "dept_name": "部门A",
        "pl_tm": {"total_count": 50, "qualified_count": 40, "qualified_ratio": 0.8, "cert_count": 35, "cert_ratio": 0.7},
        "pm": {"total_count": 30, "qualified_count": 22, "qualified_ratio": 0.7333, "cert_count": 18, "cert_ratio": 0.6},
    },
    {
        "dept_code": "030681002",
        "dept_name": "部门B",
        "pl_tm": {"total_count": 60, "qualified_count": 50, "qualified_ratio": 0.8333, "cert_count": 40, "cert_ratio": 0.6667},
        "pm": {"total_count": 35, "qualified_count": 28, "qualified_ratio": 0.8, "cert_count": 22, "cert_ratio": 0.6286},
    },
    {
        "dept_code": "030681003",
        "dept_name": "部门C",
        "pl_tm": {"total_count": 40, "qualified_count": 30, "qualified_ratio": 0.75, "cert_count": 25, "cert_ratio": 0.625},
        "pm": {"total_count": 15, "qualified_count": 10, "qualified_ratio": 0.6667, "cert_count": 10, "cert_ratio": 0.6667},
    },
)

# ---------------------------------------------------------------------------
# Organisation-wide chart series
# ---------------------------------------------------------------------------

OVERALL_TRENDS = {
    "department_appointment": (
        ("云核心网运营部", 320, 65.0),
        ("云核心网研发部", 280, 67.86),
        ("云核心网解决方案部", 240, 70.0),
        ("无线网络产品部", 350, 70.0),
        ("传送与接入产品部", 290, 70.0),
        ("C Lab（模块）", 180, 72.5),
    ),
    "organization_appointment": (("L3", 450, 68.5), ("L2", 620, 70.2), ("L1", 380, 65.8)),
    "job_category_appointment": (
        ("AI架构师", 120, 65.0),
        ("数据科学家", 150, 65.33),
        ("算法专家", 180, 65.0),
        ("产品经理", 100, 65.0),
        ("运营干部", 80, 65.0),
    ),
    "department_certification": (
        ("云核心网运营部", 208, 65.0),
        ("云核心网研发部", 190, 67.86),
        ("云核心网解决方案部", 168, 70.0),
        ("无线网络产品部", 245, 70.0),
        ("传送与接入产品部", 203, 70.0),
        ("C Lab（模块）", 130, 72.5),
    ),
    "organization_certification": (("L3", 308, 68.5), ("L2", 435, 70.2), ("L1", 250, 65.8)),
    "job_category_certification": (
        ("AI架构师", 84, 70.0),
        ("数据科学家", 105, 70.0),
        ("算法专家", 126, 70.0),
        ("产品经理", 70, 70.0),
        ("运营干部", 56, 70.0),
    ),
}

# ---------------------------------------------------------------------------
# Drill-down employees
# ---------------------------------------------------------------------------


def _employee(
    name: str,
    number: str,
    category: str,
    subcategory: str,
    depts: tuple[str, str, str],
    maturity: str,
    sub_cn: str,
    rating: str,
    grade: str,
    since: str,
    **flags: int,
) -> dict:
    first, second, third = depts
    return {
        "name": name,
        "employee_number": number,
        "competence_category": category,
        "competence_subcategory": subcategory,
        "first_level_dept": first,
        "second_level_dept": second,
        "third_level_dept": third,
        "ai_maturity": maturity,
        "mini_dept_name": third,
        "cadre_type": "技术干部",
        "is_cadre": 1,
        "competence_family_cn": "AI能力族",
        "competence_category_cn": "AI能力类",
        "competence_subcategory_cn": sub_cn,
        "direction_cn_name": "AI方向",
        "competence_rating_cn": rating,
        "competence_grade_cn": grade,
        "competence_from": since,
        **flags,
    }


EMPLOYEE_DETAILS = (
    _employee(
        "张三", "E001234", "管理类", "管理", ("云核心网运营部", "亚太运营支撑处", "技术支撑组"),
        "L2", "机器学习子类", "高级", "P5", "2023-01-01T00:00:00Z",
        is_qualifications_standard=1, is_cert_standard=1, is_passed_subject2=1,
    ),
    _employee(
        "李四", "E001235", "管理类", "管理", ("云核心网运营部", "亚太运营支撑处", "技术支撑组"),
        "L3", "深度学习子类", "专家", "P6", "2022-06-15T00:00:00Z",
        is_qualifications_standard=1, is_cert_standard=0, is_passed_subject2=0,
    ),
    _employee(
        "王五", "E001236", "软件类", "软件开发", ("云核心网研发部", "网络云平台研发室", "AI平台组"),
        "L2", "自然语言处理子类", "中级", "P4", "2023-03-20T00:00:00Z",
        is_qualifications_standard=0, is_cert_standard=1, is_passed_subject2=1,
    ),
    _employee(
        "赵六", "E001237", "软件类", "软件开发", ("云核心网研发部", "AI 网络创新室", "视觉算法组"),
        "L3", "计算机视觉子类", "高级", "P5", "2022-11-10T00:00:00Z",
        is_qualifications_standard=1, is_cert_standard=1, is_passed_subject2=1,
    ),
    _employee(
        "孙七", "E001238", "系统类", "系统架构", ("云核心网解决方案部", "5G 解决方案办", "智能优化组"),
        "L1", "强化学习子类", "专家", "P6", "2021-09-01T00:00:00Z",
        is_qualifications_standard=0, is_cert_standard=0, is_passed_subject2=0,
    ),
    _employee(
        "周八", "E001239", "研究类", "算法研究", ("云核心网解决方案部", "云化核心网方案办", "知识工程组"),
        "L2", "知识图谱子类", "中级", "P4", "2023-05-15T00:00:00Z",
        is_qualifications_standard=1, is_cert_standard=0, is_passed_subject2=1,
    ),
    _employee(
        "吴九", "E001240", "研究类", "算法研究", ("云核心网运营部", "欧洲中东非运营支撑处", "智能推荐组"),
        "L3", "推荐系统子类", "高级", "P5", "2022-08-20T00:00:00Z",
        is_qualifications_standard=0, is_cert_standard=1, is_passed_subject2=0,
    ),
    _employee(
        "郑十", "E001241", "系统类", "系统架构", ("云核心网研发部", "网络云平台研发室", "语音技术组"),
        "L1", "语音识别子类", "专家", "P6", "2021-12-01T00:00:00Z",
        is_qualifications_standard=1, is_cert_standard=1, is_passed_subject2=1,
    ),
)

# ---------------------------------------------------------------------------
# Personal course completion
# ---------------------------------------------------------------------------

DEFAULT_ACCOUNT = "123456"
DEFAULT_EMPLOYEE_NAME = "张三"

# course level -> (course name, course number, completed)
COURSE_LEVELS: dict[str, tuple[tuple[str, str, bool], ...]] = {
    "基础": (
        ("AI基础概念与原理", "COURSE_BASIC_001", True),
        ("机器学习入门", "COURSE_BASIC_002", True),
        ("深度学习基础", "COURSE_BASIC_003", True),
        ("Python编程基础", "COURSE_BASIC_004", True),
        ("数据科学基础", "COURSE_BASIC_005", True),
        ("统计学基础", "COURSE_BASIC_006", True),
        ("数据可视化", "COURSE_BASIC_007", True),
        ("算法与数据结构", "COURSE_BASIC_008", True),
        ("自然语言处理入门", "COURSE_BASIC_009", False),
        ("计算机视觉入门", "COURSE_BASIC_010", False),
    ),
    "进阶": (
        ("深度学习进阶", "COURSE_INTER_001", True),
        ("神经网络架构设计", "COURSE_INTER_002", True),
        ("模型训练与优化", "COURSE_INTER_003", True),
        ("迁移学习", "COURSE_INTER_004", True),
        ("强化学习基础", "COURSE_INTER_005", True),
        ("模型部署与工程化", "COURSE_INTER_006", False),
        ("分布式训练", "COURSE_INTER_007", False),
        ("模型压缩与加速", "COURSE_INTER_008", False),
    ),
    "高阶": (
        ("大模型原理与应用", "COURSE_ADV_001", True),
        ("Transformer架构深入", "COURSE_ADV_002", True),
        ("多模态学习", "COURSE_ADV_003", True),
        ("生成式AI技术", "COURSE_ADV_004", False),
        ("AI安全与伦理", "COURSE_ADV_005", False),
        ("AI系统架构设计", "COURSE_ADV_006", False),
    ),
    "实战": (
        ("AI项目实战：智能推荐系统", "COURSE_PRAC_001", True),
        ("AI项目实战：图像识别系统", "COURSE_PRAC_002", True),
        ("AI项目实战：对话系统", "COURSE_PRAC_003", False),
        ("AI项目实战：知识图谱构建", "COURSE_PRAC_004", False),
        ("AI项目实战：自动化运维", "COURSE_PRAC_005", False),
    ),
}
