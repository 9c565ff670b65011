import pytest

from routemap import RouteEntry, RouteTreeSyntaxError, parse_route_tree


def _pairs(entries):
    return [(e.route_path, e.import_path) for e in entries]


def test_single_route():
    source = """
import { Route as IndexRouteImport } from './routes/index'

const IndexRoute = IndexRouteImport.update({
  id: '/',
  path: '/',
  getParentRoute: () => rootRoute,
} as any)

export interface FileRoutesByFullPath {
  '/': typeof IndexRoute
}
"""
    assert parse_route_tree(source) == [RouteEntry("/", "./routes/index")]


def test_dynamic_params_and_splat():
    source = """
import { Route as IndexRouteImport } from './routes/index'
import { Route as UsersUserIdRouteImport } from './routes/users/$userId'
import { Route as ApiRpcSplatRouteImport } from './routes/api/rpc/$'

const IndexRoute = IndexRouteImport.update({ id: '/', path: '/' } as any)
const UsersUserIdRoute = UsersUserIdRouteImport.update({
  id: '/users/$userId',
  path: '/users/$userId',
} as any)
const ApiRpcSplatRoute = ApiRpcSplatRouteImport.update({
  id: '/api/rpc/$',
  path: '/api/rpc/$',
} as any)

export interface FileRoutesByFullPath {
  '/users/$userId': typeof UsersUserIdRoute
  '/api/rpc/$': typeof ApiRpcSplatRoute
  '/': typeof IndexRoute
}
"""
    assert _pairs(parse_route_tree(source)) == [
        ("/", "./routes/index"),
        ("/api/rpc/$", "./routes/api/rpc/$"),
        ("/users/$userId", "./routes/users/$userId"),
    ]


def test_children_wrapper_resolves_to_parent_not_child():
    source = """
import { Route as BaseImport } from './routes/_base'
import { Route as ChildImport } from './routes/_base/child'

const BaseRoute = BaseImport.update({ id: '/_base' } as any)
const ChildRoute = ChildImport.update({
  id: '/x',
  path: '/x',
  getParentRoute: () => BaseRoute,
} as any)

const BaseRouteChildren = { ChildRoute: ChildRoute }
const BaseWithChildren = BaseRoute._addFileChildren(BaseRouteChildren)

export interface FileRoutesByFullPath {
  '/x': typeof BaseWithChildren
}
"""
    assert _pairs(parse_route_tree(source)) == [("/x", "./routes/_base")]


def test_nested_pathless_layouts():
    source = """
import { Route as AuthRouteImport } from './routes/_auth'
import { Route as AuthAdminRouteImport } from './routes/_auth/_admin'
import { Route as AuthAdminSettingsRouteImport } from './routes/_auth/_admin/settings'

const AuthRoute = AuthRouteImport.update({ id: '/_auth' } as any)
const AuthAdminRoute = AuthAdminRouteImport.update({ id: '/_admin' } as any)
const AuthAdminSettingsRoute = AuthAdminSettingsRouteImport.update({
  id: '/settings',
  path: '/settings',
  getParentRoute: () => AuthAdminRoute,
} as any)

const AuthAdminRouteChildren = { AuthAdminSettingsRoute: AuthAdminSettingsRoute }
const AuthAdminRouteWithChildren = AuthAdminRoute._addFileChildren(AuthAdminRouteChildren)

const AuthRouteChildren = { AuthAdminRoute: AuthAdminRouteWithChildren }
const AuthRouteWithChildren = AuthRoute._addFileChildren(AuthRouteChildren)

export interface FileRoutesByFullPath {
  '/settings': typeof AuthAdminSettingsRoute
  '': typeof AuthRouteWithChildren
}
"""
    assert _pairs(parse_route_tree(source)) == [
        ("", "./routes/_auth"),
        ("/settings", "./routes/_auth/_admin/settings"),
    ]


def test_multi_level_children_chain_walks_to_innermost_import():
    source = """
import { Route as LayoutImport } from './routes/_layout'

const LayoutRoute = LayoutImport.update({ id: '/_layout' } as any)
const LayoutWithChildren = LayoutRoute._addFileChildren({})
const LayoutWithMoreChildren = LayoutWithChildren._addFileChildren({})
const LayoutOuter = LayoutWithMoreChildren._addFileChildren({})

export interface FileRoutesByFullPath {
  '/deep': typeof LayoutOuter
}
"""
    assert _pairs(parse_route_tree(source)) == [("/deep", "./routes/_layout")]


def test_index_route_under_layout():
    source = """
import { Route as AppRouteImport } from './routes/app'
import { Route as AppIndexRouteImport } from './routes/app/index'

const AppRoute = AppRouteImport.update({ id: '/app', path: '/app' } as any)
const AppIndexRoute = AppIndexRouteImport.update({
  id: '/',
  path: '/',
  getParentRoute: () => AppRoute,
} as any)

const AppRouteChildren = { AppIndexRoute: AppIndexRoute }
const AppRouteWithChildren = AppRoute._addFileChildren(AppRouteChildren)

export interface FileRoutesByFullPath {
  '/app/': typeof AppIndexRoute
  '/app': typeof AppRouteWithChildren
}
"""
    assert _pairs(parse_route_tree(source)) == [
        ("/app", "./routes/app"),
        ("/app/", "./routes/app/index"),
    ]


def test_empty_interface_gives_empty_list():
    assert parse_route_tree("export interface FileRoutesByFullPath {\n}\n") == []


def test_missing_interface_gives_empty_list():
    source = """
import { Route as IndexRouteImport } from './routes/index'
const IndexRoute = IndexRouteImport.update({ id: '/', path: '/' } as any)
"""
    assert parse_route_tree(source) == []


def test_empty_source_gives_empty_list():
    assert parse_route_tree("") == []


def test_non_typeof_members_are_skipped():
    source = """
import { Route as IndexRouteImport } from './routes/index'
const IndexRoute = IndexRouteImport.update({ id: '/', path: '/' } as any)

export interface FileRoutesByFullPath {
  '/plain': string
  '/object': { id: string }
  '/': typeof IndexRoute
  unquoted: typeof IndexRoute
}
"""
    assert _pairs(parse_route_tree(source)) == [("/", "./routes/index")]


def test_unresolved_symbol_is_excluded():
    source = """
import { Route as IndexRouteImport } from './routes/index'
const IndexRoute = IndexRouteImport.update({ id: '/', path: '/' } as any)
const VirtualRoute = createVirtualRoute()

export interface FileRoutesByFullPath {
  '/': typeof IndexRoute
  '/virtual': typeof VirtualRoute
  '/ghost': typeof NeverDeclared
}
"""
    assert _pairs(parse_route_tree(source)) == [("/", "./routes/index")]


def test_children_cycle_terminates():
    source = """
import { Route as AImport } from './routes/a'

const A = B._addFileChildren({})
const B = A._addFileChildren({})

export interface FileRoutesByFullPath {
  '/loop': typeof A
}
"""
    assert parse_route_tree(source) == []


def test_declaration_order_does_not_matter():
    source = """
export interface FileRoutesByFullPath {
  '/late': typeof LateWithChildren
}
const LateWithChildren = LateRoute._addFileChildren(LateRouteChildren)
const LateRoute = LateImport.update({ id: '/late', path: '/late' } as any)
import { Route as LateImport } from './routes/late'
"""
    assert _pairs(parse_route_tree(source)) == [("/late", "./routes/late")]


def test_type_and_value_share_a_name():
    source = """
import { Route as AppRouteImport } from './routes/app'

interface AppRoute {
  marker: true
}
const AppRoute = AppRouteImport.update({ id: '/app', path: '/app' } as any)

interface AppRouteChildren {}
const AppRouteChildren: AppRouteChildren = {}
const AppRouteWithChildren = AppRoute._addFileChildren(AppRouteChildren)

export interface FileRoutesByFullPath {
  '/app': typeof AppRouteWithChildren
}
"""
    assert _pairs(parse_route_tree(source)) == [("/app", "./routes/app")]


def test_duplicate_paths_are_kept_in_declaration_order():
    source = """
import { Route as FirstImport } from './routes/first'
import { Route as SecondImport } from './routes/second'
const First = FirstImport.update({} as any)
const Second = SecondImport.update({} as any)

export interface FileRoutesByFullPath {
  '/same': typeof Second
  '/same': typeof First
}
"""
    assert _pairs(parse_route_tree(source)) == [
        ("/same", "./routes/second"),
        ("/same", "./routes/first"),
    ]


def test_generated_file(route_tree_source):
    assert _pairs(parse_route_tree(route_tree_source)) == [
        ("/", "./routes/index"),
        ("/about", "./routes/about"),
        ("/posts", "./routes/posts"),
        ("/posts/", "./routes/posts/index"),
        ("/posts/$postId", "./routes/posts/$postId"),
    ]


def test_output_is_sorted_by_code_point(route_tree_source):
    paths = [e.route_path for e in parse_route_tree(route_tree_source)]
    assert all(a <= b for a, b in zip(paths, paths[1:]))


def test_sort_is_not_locale_aware():
    source = """
import { Route as UpperImport } from './routes/Zed'
import { Route as LowerImport } from './routes/alpha'
const Upper = UpperImport.update({} as any)
const Lower = LowerImport.update({} as any)

export interface FileRoutesByFullPath {
  '/alpha': typeof Lower
  '/Zed': typeof Upper
}
"""
    # "Z" (0x5A) sorts before "a" (0x61)
    assert [e.route_path for e in parse_route_tree(source)] == ["/Zed", "/alpha"]


def test_repeated_calls_are_identical(route_tree_source):
    assert parse_route_tree(route_tree_source) == parse_route_tree(route_tree_source)


def test_to_dict_uses_wire_names():
    assert RouteEntry("/a", "./routes/a").to_dict() == {"routePath": "/a", "importPath": "./routes/a"}


def test_unparseable_source_raises_syntax_error():
    with pytest.raises(RouteTreeSyntaxError):
        parse_route_tree("import { Route as from\nconst = ;\n")


def test_syntax_error_is_a_syntax_error():
    with pytest.raises(SyntaxError):
        parse_route_tree("export interface FileRoutesByFullPath {\n  '/': typeof IndexRoute\n")
