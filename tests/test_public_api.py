import unittest

import desuitemgr


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(desuitemgr, "WorkspaceManager"))
        self.assertTrue(hasattr(desuitemgr, "ResourceStore"))
        self.assertTrue(hasattr(desuitemgr, "MutationController"))
        self.assertTrue(hasattr(desuitemgr, "EditForm"))

        self.assertTrue(hasattr(desuitemgr, "derive"))
        self.assertTrue(hasattr(desuitemgr, "paginate"))
        self.assertTrue(hasattr(desuitemgr, "StorageUsage"))
        self.assertTrue(hasattr(desuitemgr, "TaskStatus"))

        self.assertTrue(hasattr(desuitemgr, "DesuiteError"))
        self.assertTrue(hasattr(desuitemgr, "InvalidStateError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(desuitemgr, "__all__"))
        self.assertIn("WorkspaceManager", desuitemgr.__all__)
        self.assertIn("DesuiteError", desuitemgr.__all__)
        for name in desuitemgr.__all__:
            self.assertTrue(hasattr(desuitemgr, name), name)


if __name__ == "__main__":
    unittest.main()
